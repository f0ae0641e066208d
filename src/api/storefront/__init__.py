"""Storefront bounded context: documents, SEO files and catalog actions."""
