"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "sort_by",
                "message": "Must be one of: price, title, artist, releaseDate, stock, createdAt",
                "code": "INVALID_SORT_FIELD",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {
                "detail": "Product with id 7 not found",
                "code": "NOT_FOUND"
            }

        Validation error with field details:
            {
                "detail": "Stock cannot exceed 1000 units",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {
                        "field": "quantity",
                        "message": "Stock cannot exceed 1000 units",
                        "code": "STOCK_LIMIT_EXCEEDED"
                    }
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Product with id 7 not found", "code": "NOT_FOUND"},
                {
                    "detail": "Product already exists: Black Album by Metallica",
                    "code": "CONFLICT",
                },
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "limit",
                            "message": "limit must be between 1 and 100",
                            "code": "OUT_OF_RANGE",
                        },
                    ],
                },
            ]
        }
    )
