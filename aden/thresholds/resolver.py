# ==============================================
# Threshold Resolver
# ==============================================
#
# PURPOSE:
#   Derive ONE immutable MigrationThresholds from every source that
#   may set a threshold, in strict precedence order:
#
#     built-in defaults
#       → named profile            (--profile / ADEN_PROFILE)
#       → user config file         (~/.aden/config.json)
#       → project config file      (<project>/aden-config.json)
#       → extra config files       (--config, in the order given)
#       → environment variables    (ADEN_*)
#       → CLI overrides            (--thresholds.<key> <value>)
#
#   Each source is turned into a partial patch (field → value) and
#   the patches are applied in order with dataclasses.replace. A
#   source only overwrites the fields it explicitly sets.
#
# WHY THIS CLASS EXISTS:
#   Configuration sources are messy: files can be missing or broken,
#   env vars can hold "abc". Only an unknown profile is fatal. Every
#   other problem drops the offending value, is logged, and lands in
#   self.warnings so the caller can report it.
#
# CLASS: ThresholdResolver
# ------------------------
#   Methods:
#   --------
#   - resolve(profile_name, config_paths, environ, cli_overrides) -> MigrationThresholds
#   - profile_patch(name) -> dict
#   - file_patch(path) -> dict
#   - env_patch(environ) -> dict
#   - cli_patch(overrides) -> dict
#
# FUNCTIONS:
# ----------
# - split_threshold_args(argv) -> (overrides, remaining_argv)
# - default_config_paths(project_dir, user_config_path) -> list[Path]
# - threshold_help() -> str
# - generate_config_file(directory, profile_name=None) -> Path
#
# ==============================================

import json
import logging
import math
import os
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .migration_thresholds import MigrationThresholds, ThresholdField, THRESHOLD_FIELDS
from .profiles import find_profile

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "aden-config.json"
USER_CONFIG_FILE = Path("~") / ".aden" / "config.json"
CLI_PREFIX = "--thresholds."

PathLike = Union[str, Path]

_BY_JSON_KEY = {f.json_key: f for f in THRESHOLD_FIELDS}
_BY_NAME = {f.name: f for f in THRESHOLD_FIELDS}
_BY_CLI_KEY = {f.cli_key: f for f in THRESHOLD_FIELDS}


def _coerce(spec: ThresholdField, raw: Any) -> Any:
    """
    Convert a raw override into the field's type.

    Raises:
        ValueError: if the value is not a number of the right kind
    """
    if isinstance(raw, bool) or raw is None:
        raise ValueError(f"not a number: {raw!r}")
    if spec.type is int:
        if isinstance(raw, float):
            if not raw.is_integer():
                raise ValueError(f"not an integer: {raw!r}")
            return int(raw)
        return int(str(raw).strip())
    value = float(raw) if isinstance(raw, (int, float)) else float(str(raw).strip())
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {raw!r}")
    return value


class ThresholdResolver:
    """
    Resolves thresholds from profile, files, environment and CLI.

    One resolver per run; warnings accumulate across resolve() calls.
    """

    def __init__(self):
        self.warnings: List[str] = []

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    # --- Sources ---

    def profile_patch(self, name: Optional[str]) -> Dict[str, Any]:
        """Patch for a named profile. Raises ConfigurationError when unknown."""
        if not name:
            return {}
        profile = find_profile(name)
        logger.info("Loaded profile '%s'", profile.name)
        return profile.threshold_patch()

    def file_patch(self, path: PathLike) -> Dict[str, Any]:
        """
        Patch from a JSON config file.

        A missing file yields an empty patch silently; an unreadable or
        unparseable file yields an empty patch and a warning.
        """
        path = Path(path).expanduser()
        if not path.exists():
            logger.debug("Config file not found, skipping: %s", path)
            return {}

        try:
            with open(path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            self._warn(f"Failed to load config from {path}: {e}")
            return {}

        if not isinstance(data, dict):
            self._warn(f"Failed to load config from {path}: top level is not an object")
            return {}

        logger.debug("Loading config from: %s", path)
        patch = {}
        for key, raw in data.items():
            spec = _BY_JSON_KEY.get(key) or _BY_NAME.get(key)
            if spec is None:
                # "_comment" and friends
                continue
            try:
                patch[spec.name] = _coerce(spec, raw)
            except (TypeError, ValueError):
                self._warn(f"Invalid numeric value for {key} in {path}: {raw!r}")
        return patch

    def env_patch(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Patch from ADEN_* environment variables."""
        environ = os.environ if environ is None else environ
        patch = {}
        for spec in THRESHOLD_FIELDS:
            if spec.env_var not in environ:
                continue
            raw = environ[spec.env_var]
            try:
                patch[spec.name] = _coerce(spec, raw)
            except (TypeError, ValueError):
                self._warn(f"Invalid numeric value for {spec.env_var}: {raw!r}")
        return patch

    def cli_patch(self, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Patch from CLI overrides.

        Keys may be given as "high-frequency", "thresholds.high-frequency"
        or "--thresholds.high-frequency".
        """
        patch = {}
        for key, raw in (overrides or {}).items():
            short = key[len(CLI_PREFIX):] if key.startswith(CLI_PREFIX) else key
            if short.startswith("thresholds."):
                short = short[len("thresholds."):]
            spec = _BY_CLI_KEY.get(short)
            if spec is None:
                self._warn(f"Unknown threshold option: {CLI_PREFIX}{short}")
                continue
            if raw is None:
                self._warn(f"Missing value for {CLI_PREFIX}{short}")
                continue
            try:
                patch[spec.name] = _coerce(spec, raw)
            except (TypeError, ValueError):
                self._warn(f"Invalid numeric value for {CLI_PREFIX}{short}: {raw!r}")
        return patch

    # --- Resolution ---

    def resolve(
        self,
        profile_name: Optional[str] = None,
        config_paths: Iterable[PathLike] = (),
        environ: Optional[Mapping[str, str]] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
    ) -> MigrationThresholds:
        """
        Build the effective thresholds.

        Args:
            profile_name: Optional profile name (case-insensitive)
            config_paths: JSON config files, lowest precedence first
            environ: Environment mapping (defaults to os.environ)
            cli_overrides: CLI key → value overrides

        Returns:
            The resolved, validated MigrationThresholds

        Raises:
            ConfigurationError: if profile_name is not a known profile
        """
        patches = [self.profile_patch(profile_name)]
        patches.extend(self.file_patch(p) for p in config_paths)
        patches.append(self.env_patch(environ))
        patches.append(self.cli_patch(cli_overrides))

        thresholds = MigrationThresholds()
        for patch in patches:
            if patch:
                thresholds = replace(thresholds, **patch)

        for message in thresholds.validate():
            self.warnings.append(message)

        logger.info("Configuration loaded: %s", thresholds.configuration_summary())
        return thresholds


def split_threshold_args(argv: Iterable[str]) -> Tuple[Dict[str, Optional[str]], List[str]]:
    """
    Pull "--thresholds.<key> <value>" (or "--thresholds.<key>=<value>")
    pairs out of an argument list.

    A key followed by another option (or by nothing) keeps no value;
    it is recorded as None so the resolver reports it, and the
    following option is left for argparse.

    Returns:
        (overrides keyed by short CLI key, remaining arguments)
    """
    args = list(argv)
    overrides: Dict[str, Optional[str]] = {}
    remaining: List[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg.startswith(CLI_PREFIX):
            key = arg[len(CLI_PREFIX):]
            if "=" in key:
                key, value = key.split("=", 1)
                overrides[key] = value
            elif i + 1 < len(args) and not args[i + 1].startswith("--"):
                overrides[key] = args[i + 1]
                i += 1
            else:
                overrides[key] = None
        else:
            remaining.append(arg)
        i += 1
    return overrides, remaining


def default_config_paths(
    project_dir: Optional[PathLike] = None,
    user_config_path: Optional[PathLike] = None,
) -> List[Path]:
    """User config first, then the project's aden-config.json."""
    paths = [Path(user_config_path or USER_CONFIG_FILE).expanduser()]
    if project_dir is not None:
        paths.append(Path(project_dir) / PROJECT_CONFIG_FILE)
    return paths


def threshold_help() -> str:
    lines = ["Threshold Configuration Options:", "", "CLI Arguments:"]
    for spec in THRESHOLD_FIELDS:
        lines.append(f"  {CLI_PREFIX}{spec.cli_key:<24} <{spec.type.__name__}>  sets {spec.name}")

    lines += ["", "Environment Variables:"]
    for spec in THRESHOLD_FIELDS:
        lines.append(f"  {spec.env_var:<42} same as {CLI_PREFIX}{spec.cli_key}")

    lines += [
        "",
        "Configuration Files (JSON, camelCase keys such as \"highFrequencyThreshold\"):",
        f"  {USER_CONFIG_FILE}{'':<22}User-specific configuration",
        f"  ./{PROJECT_CONFIG_FILE}{'':<20}Project-specific configuration",
        "",
        "Priority Order (highest to lowest):",
        "  1. CLI arguments",
        "  2. Environment variables",
        "  3. Files given with --config",
        "  4. Project configuration file",
        "  5. User configuration file",
        "  6. Profile defaults or built-in defaults",
    ]
    return "\n".join(lines) + "\n"


def generate_config_file(directory: PathLike, profile_name: Optional[str] = None) -> Path:
    """
    Write a sample aden-config.json holding every tunable field.

    Args:
        directory: Directory to write into (created if missing)
        profile_name: Optional profile whose values seed the file

    Returns:
        Path of the written file

    Raises:
        ConfigurationError: if profile_name is not a known profile
    """
    thresholds = MigrationThresholds()
    if profile_name:
        thresholds = replace(thresholds, **find_profile(profile_name).threshold_patch())

    document: Dict[str, Any] = {"_comment": thresholds.profile_description}
    for spec in THRESHOLD_FIELDS:
        document[spec.json_key] = getattr(thresholds, spec.name)

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    config_path = directory / PROJECT_CONFIG_FILE
    with open(config_path, "w", encoding="utf-8") as fh:
        json.dump(document, fh, indent=2)
        fh.write("\n")

    logger.info("Generated configuration file: %s", config_path)
    return config_path
