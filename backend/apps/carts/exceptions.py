class CartNotFoundError(LookupError):
    """Raised when a cart id does not match any stored cart."""


class CartProductNotFoundError(LookupError):
    """Raised when a product is not a line item of the cart."""


class InvalidCartItemsError(ValueError):
    """Raised when a replacement item list is not a list."""


class InvalidQuantityError(ValueError):
    """Raised when a line item quantity is not a positive integer."""
