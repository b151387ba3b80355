"""
atlas — the map side of the path finder.

    atlas.shared.models  — pydantic models for locations, edges, graphs, results
    atlas.planner        — default map data and the RoutePlanner service
"""
