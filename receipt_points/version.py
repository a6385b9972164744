from __future__ import annotations

import importlib.metadata

from .config import SERVICE_NAME, _env


def _package_version() -> str:
	try:
		return importlib.metadata.version(SERVICE_NAME)
	except importlib.metadata.PackageNotFoundError:
		return "0.0.0+local"


def get_version_info() -> dict[str, str]:
	# build metadata is stamped into the container environment at build time
	return {
		"version": _package_version(),
		"build_time": _env("BUILD_TIME", "unknown", str),
		"git_commit": _env("GIT_COMMIT", "unknown", str),
	}
