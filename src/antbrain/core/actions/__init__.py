from .action import (
    Action,
    BaseAction,
    ConditionalAction,
    TerminalAction,
    action_from_element,
    make_action,
    random_any,
    random_conditional,
    random_terminal,
)
from .catalogue import ActionBehavior, ActionCatalogue, get_action_catalogue

__all__ = [
    "Action",
    "ActionBehavior",
    "ActionCatalogue",
    "BaseAction",
    "ConditionalAction",
    "TerminalAction",
    "action_from_element",
    "get_action_catalogue",
    "make_action",
    "random_any",
    "random_conditional",
    "random_terminal",
]
