from .image_analyzer import ImageAnalyzer
from .pdf_analyzer import PDFAnalyzer
