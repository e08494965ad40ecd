"""Parcel domain models and unit helpers."""
