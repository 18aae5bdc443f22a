"""OCR runners for image-based PDFs."""
