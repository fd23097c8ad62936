"""Local package builds: extraction, artifact planning and makepkg."""

from yao.build.builder import Builder
from yao.build.extract import Extractor
from yao.build.planner import ArtifactPlanner
from yao.build.workspace import build_workspace

__all__ = ["ArtifactPlanner", "Builder", "Extractor", "build_workspace"]
