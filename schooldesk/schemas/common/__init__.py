from .error import SuccessResponse
from .fields import NonEmptyStr, OptionalStr, RequiredId

__all__ = ["SuccessResponse", "NonEmptyStr", "OptionalStr", "RequiredId"]
