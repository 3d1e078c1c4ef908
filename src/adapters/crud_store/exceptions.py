from src.domain.exceptions import ClientError, ServiceError


class DuplicateItemError(ClientError):
    """
    Exception raised when an item already exists in the database.
    """

    code = 400


class ItemDoesNotExist(ClientError):
    """
    Exception raised when an item does not exist in the database.
    """

    code = 404


class StoreQueryFailed(ServiceError):
    """
    Exception raised when a read against the record store fails (connectivity,
    timeout or a query the server rejects). List endpoints answer these with
    the same generic client-error status as a bad cursor.
    """

    code = 422
