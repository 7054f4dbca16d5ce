"""
JSON 渲染配置文件
包含所有常量、MIME 类型和转义表
"""

# ==================== MIME 类型 ====================
MIME_JSON = "application/json"
MIME_JS = "text/javascript"


# ==================== JSONP 配置 ====================
# "/**/" prefix guards against Rosetta-Flash style content sniffing
JSONP_PREFIX = "/**/"

# dotted JavaScript identifier path, e.g. "alert" or "jQuery.handlers.cb_12"
JSONP_CALLBACK_PATTERN = r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$"
JSONP_CALLBACK_MAX_LENGTH = 128

# content_type overrides must stay JSON or JavaScript, optionally with parameters
JSON_CONTENT_TYPE_PATTERN = (
    r"^(application/([\w.-]+\+)?json|text/javascript|application/(x-)?javascript)"
    r"(\s*;.*)?$"
)


# ==================== 转义配置 ====================
# Characters that are legal inside a JSON string but break out of (or
# terminate) a <script> context.
JS_ESCAPE_MAP = {
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}


# ==================== 渲染选项 ====================
DEFAULT_STATUS = 200

# Reserved by the /api/render request body
RESERVED_OPTION_KEYS = frozenset({"value"})

# Options consumed by the renderer itself; never forwarded to __json__ hooks
RENDER_OPTION_KEYS = frozenset({"status", "content_type", "callback", "escape"})

# View-layer options a controller may pass along; also never forwarded
VIEW_OPTION_KEYS = frozenset({"layout", "location", "prefixes", "template"})


# ==================== 弃用提示 ====================
ESCAPE_JSON_RESPONSES_DEPRECATION = (
    "Setting escape_json_responses = true is deprecated and will have no effect "
    "in the next major release. Set it to false, or remove the config."
)


# ==================== 环境变量 ====================
ENV_ESCAPE_JSON_RESPONSES = "ESCAPE_JSON_RESPONSES"
ENV_LOG_LEVEL = "LOG_LEVEL"

DEFAULT_ESCAPE_JSON_RESPONSES = False
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


def parse_bool(raw: str | None, default: bool = False) -> bool:
    """Interpret an environment string as a boolean flag."""
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY
