from fastapi import HTTPException, status


class ServiceException(HTTPException):
    """Domain failure surfaced directly to the caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request could not be processed"

    def __init__(self, message: str = None):
        super().__init__(status_code=self.status_code, detail=message or self.message)


class ProductNotFoundError(ServiceException):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Product not found"


class ProductNotOnSaleError(ServiceException):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    message = "Product is not on sale"


class AlreadyFavoritedError(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    message = "Product already favorited"


class NotFavoritedError(ServiceException):
    status_code = status.HTTP_409_CONFLICT
    message = "Product not favorited"


class SearchUnavailableError(ServiceException):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Search service unavailable"
