"""
PDF Render Service - on-demand HTML/URL to PDF rendering.

A single request handler that renders raw HTML or a URL in headless
Chromium (via Playwright) and returns the PDF as a base64 response
envelope. Runs as a serverless function (`pdf_render.handler.handler`)
or behind FastAPI (`pdf_render.app:app`).
"""

__version__ = "0.1.0"
