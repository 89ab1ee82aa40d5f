class ProductValidationError(Exception):
    """Exception raised when product input or query parameters are invalid."""
    pass


class InvalidSortFieldError(ProductValidationError):
    """Exception raised when a listing is sorted by an unknown field."""
    pass


class InvalidSortOrderError(ProductValidationError):
    """Exception raised when a sort order is neither ascending nor descending."""
    pass


class InvalidPaginationError(ProductValidationError):
    """Exception raised when page or page size is below 1."""
    pass


class ProductNotFoundError(Exception):
    """Exception raised when the requested product doesn't exist."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")
