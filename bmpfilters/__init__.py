"""Reading, editing and writing 8-bit and 24-bit BMP images, with a filter command."""

__version__ = "0.1.0"
__all__ = ["bmp8", "bmp24", "cli"]