"""Tests for viewport and radius queries against a recording store."""

from __future__ import annotations

import logging

import pytest

from conftest import RecordingStore, feature_row, list_row, pid
from landscore.core.errors import InvalidBounds, InvalidRadius
from landscore.query.bounds import BoundingBox, RadiusQuery
from landscore.query.engine import ParcelQueryEngine
from landscore.query.spatial import SpatialQueryExecutor

BBOX = BoundingBox.from_edges(30.3, 30.2, -97.7, -97.8)


async def test_features_statement_binds_tolerance_then_envelope():
    store = RecordingStore([feature_row(1)])
    executor = SpatialQueryExecutor(store)
    collection = await executor.bbox_features(
        BoundingBox.from_edges(30.3, 30.2, -97.7, -97.8, zoom=8)
    )

    stmt = store.statements[0]
    assert stmt.params == {
        "p1": 0.001,
        "p2": -97.8,
        "p3": 30.2,
        "p4": -97.7,
        "p5": 30.3,
        "p6": 500,
    }
    assert "ST_MakeEnvelope(:p2, :p3, :p4, :p5, 4326)" in stmt.sql
    assert "ST_SimplifyPreserveTopology(p.geometry, :p1)" in stmt.sql
    assert "LIMIT :p6" in stmt.sql

    assert collection.type == "FeatureCollection"
    feature = collection.features[0]
    assert feature.id == pid(1)
    assert feature.geometry["type"] == "MultiPolygon"
    assert feature.properties["soilType"] == "LOAM"


async def test_feature_without_geometry():
    row = feature_row(2)
    row["geojson"] = None
    collection = await SpatialQueryExecutor(RecordingStore([row])).bbox_features(BBOX)
    assert collection.features[0].geometry is None


async def test_list_statement_has_no_geometry():
    store = RecordingStore([list_row(1), list_row(2, price=None)])
    items = await SpatialQueryExecutor(store).bbox_list(BBOX)

    stmt = store.statements[0]
    assert stmt.params == {"p1": -97.8, "p2": 30.2, "p3": -97.7, "p4": 30.3, "p5": 500}
    assert "ST_AsGeoJSON" not in stmt.sql
    assert [i.id for i in items] == [pid(1), pid(2)]
    assert items[1].estimated_price is None


async def test_admission_cap_truncates_and_warns(caplog):
    store = RecordingStore([list_row(n) for n in range(1, 6)])
    executor = SpatialQueryExecutor(store, admission_cap=3)

    with caplog.at_level(logging.WARNING, logger="landscore.query.spatial"):
        items = await executor.bbox_list(BBOX)

    assert len(items) == 3
    assert store.statements[0].params["p5"] == 3
    assert "admission cap" in caplog.text


async def test_under_cap_does_not_warn(caplog):
    store = RecordingStore([list_row(1)])
    with caplog.at_level(logging.WARNING, logger="landscore.query.spatial"):
        await SpatialQueryExecutor(store, admission_cap=3).bbox_list(BBOX)
    assert "admission cap" not in caplog.text


async def test_near_statement_binds_point_radius_and_limit():
    rows = [
        list_row(3, distance_meters=12.5),
        list_row(1, distance_meters=80.0),
    ]
    store = RecordingStore(rows)
    results = await SpatialQueryExecutor(store).near_point(
        RadiusQuery.from_params(30.27, -97.74, 250, 10)
    )

    stmt = store.statements[0]
    assert stmt.params == {"p1": -97.74, "p2": 30.27, "p3": 250.0, "p4": 10}
    assert "ST_DWithin" in stmt.sql
    assert "ORDER BY distance_meters ASC, p.id ASC" in stmt.sql
    assert [r.id for r in results] == [pid(3), pid(1)]
    assert results[0].distance_meters == 12.5


async def test_near_limit_is_capped():
    store = RecordingStore()
    executor = SpatialQueryExecutor(store, admission_cap=50)
    await executor.near_point(RadiusQuery.from_params(30.27, -97.74, 250, 200))
    assert store.statements[0].params["p4"] == 50


async def test_custom_srid():
    store = RecordingStore()
    await SpatialQueryExecutor(store, srid=3857).bbox_list(BBOX)
    assert ", 3857)" in store.statements[0].sql


class TestEngineSpatial:
    async def test_invalid_bounds_never_reach_the_store(self):
        store = RecordingStore()
        engine = ParcelQueryEngine(store)
        with pytest.raises(InvalidBounds):
            await engine.bbox_features(30.2, 30.3, -97.7, -97.8)
        with pytest.raises(InvalidBounds):
            await engine.bbox_list(30.3, 30.2, -97.7, -97.8 + 360)
        assert store.statements == []

    async def test_invalid_radius_never_reaches_the_store(self):
        store = RecordingStore()
        engine = ParcelQueryEngine(store)
        with pytest.raises(InvalidRadius):
            await engine.near_point(30.27, -97.74, radius_meters=0)
        assert store.statements == []

    async def test_near_point_uses_configured_defaults(self):
        store = RecordingStore()
        engine = ParcelQueryEngine(store)
        await engine.near_point(30.27, -97.74)
        assert store.statements[0].params["p3"] == 1000.0
        assert store.statements[0].params["p4"] == 20

    async def test_zoom_passes_through(self):
        store = RecordingStore()
        await ParcelQueryEngine(store).bbox_features(30.3, 30.2, -97.7, -97.8, zoom=16)
        assert store.statements[0].params["p1"] == 0.00001
