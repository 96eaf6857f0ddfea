"""Deterministic chunk ids. Same text + config + position gives the same id."""

import hashlib
import json

from splitter_service.config.splitting.models import SplitConfig


def compute_chunk_hash(chunk_text: str, config: SplitConfig) -> str:
    """Chunk hash = SHA-256(chunk_text + canonical config)."""
    config_canonical = json.dumps(config.model_dump(mode="json"), sort_keys=True)
    payload = f"{chunk_text}|{config_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def generate_chunk_id(source_key: str, chunk_index: int, chunk_hash: str) -> str:
    """Generate a deterministic chunk_id from source, index, and hash."""
    payload = f"{source_key}:{chunk_index}:{chunk_hash}"
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:24]
    return f"chunk_{digest}"
