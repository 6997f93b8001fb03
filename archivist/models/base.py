"""Base model class for records kept in the JSON store."""

from typing import Any, Dict

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer


class StoreModel(BaseModel):
    """Base model for persisted JSON documents.

    Fields use camelCase aliases on disk. Keys the model does not declare are
    kept as extras so that a load/save cycle never drops data. Declared keys
    read as ``null`` are written back as ``null``; optional fields that were
    never set are left out.
    """

    model_config = {"populate_by_name": True, "extra": "allow"}

    @model_serializer(mode="wrap")
    def _drop_unset_none(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if name in self.model_fields_set or getattr(self, name) is not None:
                continue
            data.pop(name, None)
            if field.alias:
                data.pop(field.alias, None)
        return data

    def to_store_dict(self) -> Dict[str, Any]:
        """Serialize with on-disk key names."""
        return self.model_dump(by_alias=True)
