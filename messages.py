# messages.py
# Fixed response texts and status codes

QUERY_EXECUTION_ERROR = "SQL statement execution not successful: "
INVALID_BODY_ERROR = "Request Body is not valid"
DB_CONNECTION_ERROR = "Failed to get database connection: "
QUERY_EXECUTION_SUCCESS = "SQL Statement successfully executed "
LIVE_CHECK = "This API is alive and well"

SUCCEEDED = 200
FAILED = 500
