from shorter.utils.config import app_env, app_name, project_root, app_prefix, load_config
from shorter.utils.helpers import get_short_url, json_response, guarantee_500_response
from shorter.utils.shortener import generate_shortcode, ShortcodeGenerator
from shorter.utils.validators import validate_target_url, is_valid_shortcode
from shorter.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'ShortcodeGenerator',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'get_short_url',
    'json_response',
    'guarantee_500_response',
    'validate_target_url',
    'is_valid_shortcode',
    'initialize_logging',
]
