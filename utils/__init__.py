from .env import load_project_dotenv  # noqa: F401
from .logger import get_logger  # noqa: F401
from .openai_utils import completion_text, safe_chat_completion  # noqa: F401
from .text import canonicalize, truncate  # noqa: F401

# Load the project-level .env once utils is imported, before any config is read.
load_project_dotenv()
