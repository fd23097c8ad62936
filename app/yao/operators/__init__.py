"""Package operators for executing installations."""

from yao.operators.pacman import DECLINED_EXIT_CODE, InstallStatus, PacmanOperator

__all__ = ["DECLINED_EXIT_CODE", "InstallStatus", "PacmanOperator"]
