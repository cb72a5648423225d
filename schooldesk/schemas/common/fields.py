from typing import Annotated, Optional

from pydantic import BeforeValidator, Field, StringConstraints


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Trimmed and required to be non-empty
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Trimmed; blank strings become None
OptionalStr = Annotated[
    Optional[Annotated[str, StringConstraints(strip_whitespace=True)]],
    BeforeValidator(_blank_to_none)
]

RequiredId = Annotated[int, Field(gt=0)]
