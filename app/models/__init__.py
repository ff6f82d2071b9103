from .base import Base  # noqa: F401
from .user import SavedPrompt, User, UserFollow, UserRole  # noqa: F401
from .prompt import Prompt, PromptComment, PromptLike  # noqa: F401
