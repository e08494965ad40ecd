"""Parcel query engine: filter compilation, spatial, search and stats."""
