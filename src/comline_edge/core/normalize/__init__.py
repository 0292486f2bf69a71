from .models import ProductAttributes, PublicProduct

__all__ = ["ProductAttributes", "PublicProduct"]
