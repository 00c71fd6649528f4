# Log event names / error codes
INVALID_JSON_BODY = 'SHORTEN_URL:INVALID_JSON_BODY'
MISSING_TARGET_URL = 'SHORTEN_URL:MISSING_TARGET_URL'
SHORTEN_FAILED = 'SHORTEN_URL:SHORTEN_FAILED'
SHORTEN_SUCCESS = 'SHORTEN_URL:SHORTEN_SUCCESS'
