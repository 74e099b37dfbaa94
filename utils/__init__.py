from .env import load_project_dotenv  # noqa: F401
from .formatters import format_currency, format_percentage  # noqa: F401
