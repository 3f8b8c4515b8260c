from .fields import (  # noqa: F401
    DecodedField,
    FieldDescriptor,
    FieldKind,
    NamedValue,
    Param,
    SchemaItem,
    to_jsonable,
)
