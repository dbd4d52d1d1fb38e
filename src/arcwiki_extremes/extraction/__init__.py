# ABOUTME: Data extraction from the upstream wiki
# ABOUTME: Pipeline Stage 1: song catalog and per-page note counts

"""
Extraction Layer: Get raw data from external sources

This layer handles:
- Cached, retrying fetches of raw wiki pages and JSON templates
- Building the song catalog from the song list and transition tables
- Pulling note counts out of page wikitext

Data Flow: Wiki -> Raw page text / JSON -> core/ models
"""

# Import submodules directly; they depend on core.models
