"""Bases comunes del dominio."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel
from pydantic.config import ConfigDict


class DomainModel(BaseModel):
    """Entidad devuelta por la API. Inmutable una vez construida."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class InputModel(BaseModel):
    """Entrada de create/update.

    Los campos opcionales en `None` no se envían (el servidor aplica su default),
    salvo donde el contrato wire exige `null` explícito.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    @classmethod
    def from_entity(cls, entity: DomainModel) -> Self:
        """Construye la entrada a partir de una entidad leída de la API.

        Lee los campos por atributo, así que los que solo existen en la
        entidad (`id`, timestamps del servidor) se ignoran en vez de chocar
        con `extra="forbid"`. Los sub-modelos se convierten igual. Las
        uniones etiquetadas se resuelven en cada recurso (`to_*_input`).
        """

        return cls.model_validate(entity, from_attributes=True)
