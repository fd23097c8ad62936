"""Package manager probes used while planning."""

from yao.scanners.pacman import PacmanProbe

__all__ = ["PacmanProbe"]
