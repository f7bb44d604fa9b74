from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseIR(BaseModel):
    """
    Common base for every document entity.

    Entities are frozen once built: edits go through re-parse or
    model_copy(update=...), never in-place mutation. Wire names are camelCase.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
