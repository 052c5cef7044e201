from pathtracer.sampling.pdf import (
    PDF, NullPDF, CosPDF, HittablePDF, MixturePDF, PhongSpecularPDF, PhongPDF
)

__all__ = ['PDF', 'NullPDF', 'CosPDF', 'HittablePDF', 'MixturePDF',
           'PhongSpecularPDF', 'PhongPDF']
