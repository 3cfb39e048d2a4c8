"""
@file __init__.py
@brief EvacRoute application package initialization

@details
Flood-aware evacuation routing: a road network loaded from GeoJSON is turned
into a directed graph, segments crossing active flood zones are penalized,
and the safest route between two coordinates is served over HTTP.

**Package Structure:**
- api/: FastAPI route handlers and GeoJSON mapping
- core/: configuration, logging, caching, middleware, health, error handlers
- models/: coordinates, flood zones, road segments, graph and route values
- services/: graph building, hazard detection, route calculation, use case
- etl/: GeoJSON loaders for road networks and flood zones

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0

@see main for FastAPI application setup
@see api.routes for endpoint documentation
@see services.route_calculation for the routing algorithm
"""
