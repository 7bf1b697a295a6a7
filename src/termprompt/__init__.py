"""termprompt - lifecycle and render engine for interactive terminal prompts."""

from termprompt.api import create_prompt, prompt
from termprompt.core.choices import Choice
from termprompt.core.exceptions import (
    PromptCancelledError,
    PromptClosedError,
    PromptConfigError,
    StatusAssignmentError,
    TermPromptError,
)
from termprompt.core.options import PromptOptions
from termprompt.core.prompt import Prompt
from termprompt.core.state import PromptState

__all__ = [
    "Choice",
    "Prompt",
    "PromptCancelledError",
    "PromptClosedError",
    "PromptConfigError",
    "PromptOptions",
    "PromptState",
    "StatusAssignmentError",
    "TermPromptError",
    "create_prompt",
    "prompt",
]
