"""
Configuration constants for the VaultKeep application.
"""

import os

# Application Metadata
APP_VERSION = "1.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "VaultKeep"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_TITLE_PREFIX = f"{APP_NAME} v{APP_VERSION}"  # Use: Prefix for the application window titles, combining name and version. Type: str (f-string). Range: Derived from APP_NAME and APP_VERSION.
# Use: Disclaimer displayed in the application. Type: str (multi-line). Range: Any valid string.
APP_DISCLAIMER = """
VaultKeep is a demo vault. Secrets are stored in clear text in a local file
and no encryption or authentication is performed. Do not store real
credentials in it.
"""

# Storage Settings
CONFIG_DIR_NAME = ".vaultkeep"  # Use: Name of the hidden directory within the user's home directory where VaultKeep stores its state file. Type: str. Range: Any valid directory name.
STORAGE_FILE = "storage.json"  # Use: Filename of the local key/value state file. Type: str. Range: Any valid filename.
STORAGE_PATH_ENV = "VAULTKEEP_STORAGE"  # Use: Environment variable overriding the full path of the state file. Type: str. Range: Any environment variable name.
VAULT_STORAGE_KEY = "vault_data"  # Use: Local storage key holding the serialized vault snapshot. Type: str. Range: Any string.
LOCALE_STORAGE_KEY = "lang"  # Use: Local storage key holding the selected locale code. Type: str. Range: Any string.
SNAPSHOT_VERSION = 1  # Use: Schema version written into every vault snapshot. Type: int. Range: Positive integer; bump on incompatible format changes.

# Localization Settings
SUPPORTED_LOCALES = ("en", "vi", "zh")  # Use: Locale codes the application ships strings for. Type: tuple[str]. Range: ISO 639-1 codes.
DEFAULT_LOCALE = "vi"  # Use: Locale used when none has been stored yet. Type: str. Range: One of SUPPORTED_LOCALES.
LOCALE_LANGUAGE_NAMES = {  # Use: Human language name sent to the tip service for each locale. Type: dict[str, str]. Range: One entry per SUPPORTED_LOCALES code.
    "en": "English",
    "vi": "Vietnamese",
    "zh": "Chinese",
}

# Audit Settings
WEAK_PASSWORD_LENGTH = 10  # Use: Login passwords shorter than this are reported as weak. Type: int. Range: Positive integer.
REUSED_PENALTY = 15  # Use: Health score points deducted per reused login. Type: int. Range: 0 to 100.
WEAK_PENALTY = 10  # Use: Health score points deducted per weak login. Type: int. Range: 0 to 100.
MAX_HEALTH_SCORE = 100  # Use: Health score of a vault with nothing to penalize. Type: int. Range: 100.
HEALTH_EXCELLENT_THRESHOLD = 90  # Use: Scores above this are labelled excellent. Type: int. Range: 0 to 100.
HEALTH_GOOD_THRESHOLD = 70  # Use: Scores above this (and not excellent) are labelled good. Type: int. Range: 0 to 100.

# Password Generator Settings
PASSWORD_GENERATOR_DEFAULT_LENGTH = 16  # Use: Default length for generated passwords. Type: int. Range: PASSWORD_GENERATOR_MIN_LENGTH to PASSWORD_GENERATOR_MAX_LENGTH.
PASSWORD_GENERATOR_MIN_LENGTH = 8  # Use: Minimum length offered by the generator UI. Type: int. Range: Positive integer.
PASSWORD_GENERATOR_MAX_LENGTH = 64  # Use: Maximum length offered by the generator UI. Type: int. Range: Positive integer.
PASSWORD_GENERATOR_SYMBOLS = "!@#$%^&*()_+~`|}{[]:;?><,./-="  # Use: Symbol characters appended to the alphabet when symbols are requested. Type: str. Range: Any string of printable characters.

# Tip Service Settings
TIP_API_KEY_ENVS = ("VAULTKEEP_API_KEY", "GEMINI_API_KEY")  # Use: Environment variables checked, in order, for the text service API key. Type: tuple[str]. Range: Environment variable names.
TIP_MODEL = os.environ.get("VAULTKEEP_MODEL", "gemini-3-flash-preview")  # Use: Model name used for tip and strength requests. Type: str. Range: Any model exposed by the service.
TIP_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"  # Use: Base URL of the text generation REST API. Type: str. Range: Valid https URL.
TIP_REQUEST_TIMEOUT_SECONDS = 15.0  # Use: Timeout applied to each tip or strength request. Type: float. Range: Positive number.
TIP_TEMPERATURE = 0.7  # Use: Sampling temperature for tip requests. Type: float. Range: 0.0 to 2.0.
TIP_TOP_P = 0.95  # Use: Nucleus sampling parameter for tip requests. Type: float. Range: 0.0 to 1.0.
FALLBACK_TIPS = {  # Use: Tip shown when the service cannot be reached. Type: dict[str, str]. Range: One entry per SUPPORTED_LOCALES code.
    "en": "Keep your master password unique and enable 2FA for maximum security.",
    "vi": "Giữ mật khẩu chính của bạn là duy nhất và bật 2FA để bảo mật tối đa.",
    "zh": "保持主密码唯一，并启用双重身份验证（2FA）以获得最高安全性。",
}
FALLBACK_STRENGTH = (40, "Medium", "Ensure a mix of symbols and cases.")  # Use: Score, label and feedback returned when strength analysis fails. Type: tuple[int, str, str]. Range: Score 0 to 100.

# UI Settings
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS = 30  # Use: Timeout in seconds after which copied secrets are cleared from the clipboard. Type: int. Range: Positive integer.
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT = CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS * 1000  # Use: Clipboard clear timeout in milliseconds. Derived from CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS. Type: int. Range: Derived value.
NOTICE_TIMEOUT_MS = 3000  # Use: How long transient notices stay in the status bar, in milliseconds. Type: int. Range: Positive integer.
TABLE_PASSWORD_HIDDEN_TEXT = "••••••••"  # Use: Placeholder text displayed in the UI for hidden passwords. Type: str. Range: Any string.
APP_STYLE = 'Fusion'  # Use: PyQt5 application style. Type: str. Range: Valid PyQt5 style names (e.g., 'Fusion', 'Windows', 'Macintosh').

# Logging Settings
LOG_LEVEL = os.environ.get("VAULTKEEP_LOG_LEVEL", "INFO")  # Use: Root log level configured at startup. Type: str. Range: DEBUG, INFO, WARNING, ERROR, CRITICAL.
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string for log records. Type: str. Range: Any logging format string.


def get_api_key():
    """Return the text service API key from the environment, or None."""
    for name in TIP_API_KEY_ENVS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def get_storage_path() -> str:
    """Return the path of the local state file, creating its directory."""
    override = os.environ.get(STORAGE_PATH_ENV)
    if override:
        return override
    app_dir = os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
    os.makedirs(app_dir, exist_ok=True)
    return os.path.join(app_dir, STORAGE_FILE)
