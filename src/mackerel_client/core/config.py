"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar los
  clientes de recursos.
- Permite que el transporte HTTP lea config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mackerel_client.__version__ import __version__

DEFAULT_API_BASE = "https://api.mackerelio.com/"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "mackerel-client"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "mackerel-client"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "mackerel-client"
    return Path.home() / ".config" / "mackerel-client"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class ClientSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el dominio.
    - Un único contrato de configuración para el transporte y la fachada.
    """

    model_config = SettingsConfigDict(
        env_prefix="MACKEREL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero, luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key de la organización (cabecera X-Api-Key).",
    )
    api_base: str = Field(
        default=DEFAULT_API_BASE,
        min_length=8,
        description="URL base de la API; sobrescribible para entornos de prueba.",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout propio.",
    )
    user_agent: str = Field(
        default=f"mackerel-client-python/{__version__}",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
