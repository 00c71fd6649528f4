# Log event names / error codes
MISSING_SHORTCODE = 'REDIRECT_URL:MISSING_SHORTCODE'
REDIRECT_FAILED = 'REDIRECT_URL:REDIRECT_FAILED'
REDIRECT_SUCCESS = 'REDIRECT_URL:REDIRECT_SUCCESS'
