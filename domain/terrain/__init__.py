"""Terrain Bounded Context.

Responsible for elevation tiles and path sampling:
- Value Objects: GeoPoint, Segment, ElevationGrid, ProfileSample, ElevationProfile
- Codec: tile identifier <-> origin
- Services: elevation_profile (path sampling), great_circle_distance
"""
