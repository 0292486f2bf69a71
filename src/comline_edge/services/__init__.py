from .doctor import run_doctor_checks
from .lookup import ProductLookupService

__all__ = ["ProductLookupService", "run_doctor_checks"]
