# entryfields/core/fields/custom/__init__.py
from . import number_buttons, rich_text

# Registered after CORE_FIELDS: capabilities supplied here replace the core
# ones when a type name is reused.
CUSTOM_FIELDS = {
    "number-buttons": number_buttons.FIELD,
    "rich-text": rich_text.FIELD,
}

__all__ = ["CUSTOM_FIELDS"]
