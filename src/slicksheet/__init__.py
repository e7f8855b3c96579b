"""SlickSheet: content data and Handlebars-style templates for Typst sheets."""

__version__ = "0.1.0"
