# prsmath/camera/__init__.py
from .projection import ProjectionCamera, ProjectionConfig

__all__ = ['ProjectionCamera', 'ProjectionConfig']
