from .lmstudio import LMStudioProvider
from .ollama import OllamaProvider

__all__ = ["LMStudioProvider", "OllamaProvider"]
