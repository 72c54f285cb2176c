from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from home_ranking.core.config import settings
from home_ranking.ingestion.providers.pokemon_home.client import PokemonHomeClient


@contextmanager
def provider_scope() -> Iterator[PokemonHomeClient]:
    """
    Context-managed upstream client for CLI commands.
    Ensures both HTTP connection pools are closed.
    """
    client = PokemonHomeClient.from_settings(settings)
    try:
        yield client
    finally:
        client.close()
