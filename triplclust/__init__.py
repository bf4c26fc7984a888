"""Point clouds, triplets of collinear points, option parsing and result output."""

__version__ = "1.3.0"

__all__ = ["util", "pointcloud", "triplet", "option", "output"]