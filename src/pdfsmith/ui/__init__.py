"""User-facing interfaces for pdfsmith."""
