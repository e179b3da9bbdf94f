"""Command-line utilities (nuxsec-xsec-comp, nuxsec-xsec-overlay)."""
