# Domain Words Package
from .models import DisplayedWord, WordStatus

__all__ = ["DisplayedWord", "WordStatus"]
