from typing import Optional, Any, Dict


class ExposureCalculationError(Exception):
    """Base exception for exposure calculation errors"""

    def __init__(
            self,
            message,
            error_code: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception into a dictionary."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details,
        }


class InvalidInputError(ExposureCalculationError):
    """One or more of camera, lens, film stock or lighting condition is missing."""
    pass


class NoValidCombinationError(ExposureCalculationError):
    """No aperture/shutter pair lands within tolerance of the target EV."""
    pass
