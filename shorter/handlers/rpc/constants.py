# RPC methods and their aliases
METHOD_SHORTEN = 'Shorter.Post'
METHOD_RESOLVE = 'Shorter.Get'
METHOD_ALIASES = {
    METHOD_SHORTEN: METHOD_SHORTEN,
    'shorten': METHOD_SHORTEN,
    METHOD_RESOLVE: METHOD_RESOLVE,
    'resolve': METHOD_RESOLVE,
}

# Log event names / error codes
INVALID_REQUEST = 'RPC:INVALID_REQUEST'
UNKNOWN_METHOD = 'RPC:UNKNOWN_METHOD'
CALL_FAILED = 'RPC:CALL_FAILED'
CALL_SUCCESS = 'RPC:CALL_SUCCESS'
