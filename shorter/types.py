from typing import Any


# Type aliases for transport payloads
type HandlerEvent = dict[str, Any]
type HandlerContext = Any
type HandlerResponse = dict[str, Any]

# Type alias for raw (YAML) configuration documents
type RawConfig = dict[str, Any]
