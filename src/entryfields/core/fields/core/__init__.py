# entryfields/core/fields/core/__init__.py
from . import autocomplete, boolean, code, date, file, image, number, reference, rich_text, select, string, text, uuid

# Registration order is fixed; see RegistryBuilder for the override policy.
CORE_FIELDS = {
    "string": string.FIELD,
    "text": text.FIELD,
    "code": code.FIELD,
    "rich-text": rich_text.FIELD,
    "number": number.FIELD,
    "boolean": boolean.FIELD,
    "uuid": uuid.FIELD,
    "date": date.FIELD,
    "select": select.FIELD,
    "autocomplete": autocomplete.FIELD,
    "reference": reference.FIELD,
    "file": file.FIELD,
    "image": image.FIELD,
}

__all__ = ["CORE_FIELDS"]
