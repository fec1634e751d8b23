"""SDK for loading .env files into the environment (python-dotenv style)."""

from __future__ import annotations

import logging
from pathlib import Path

from envlet.config import EnvletConfig, load_config
from envlet.env_file import (
    Definition,
    definitions_to_dict,
    is_valid_name,
    parse_env_text,
    read_env_file,
)
from envlet.store import EnvironmentStore
from envlet.stores.process import ProcessEnvironmentStore

logger = logging.getLogger(__name__)

# Snapshot of os.environ taken when envlet.sdk is first imported.
_DEFAULT_STORE: EnvironmentStore = ProcessEnvironmentStore()


def default_store() -> EnvironmentStore:
    """Return the process-wide store whose snapshot was captured at import."""
    return _DEFAULT_STORE


def _read_definitions(
    path: str | Path | None,
    cfg: EnvletConfig,
    mode: str | None,
    strip_quotes: bool | None,
    max_offset: int | None,
) -> tuple[Definition, ...] | None:
    """Parse *path* (default: config env_file) with args taking precedence over config.

    Returns ``None`` when the file does not exist.
    """
    env_path = Path(path) if path is not None else Path(cfg.env_file)
    if not env_path.is_file():
        logger.debug("No env file at %s", env_path)
        return None
    definitions = parse_env_text(
        read_env_file(env_path),
        mode=mode or cfg.mode,
        strip_quotes=cfg.strip_quotes if strip_quotes is None else strip_quotes,
        max_offset=cfg.max_offset if max_offset is None else max_offset,
    )
    logger.debug("Parsed %d definition(s) from %s", len(definitions), env_path)
    return definitions


def dotenv_values(
    path: str | Path | None = None,
    *,
    mode: str | None = None,
    strip_quotes: bool | None = None,
    max_offset: int | None = None,
) -> dict[str, str]:
    """Return the variables of a .env file as a dict without modifying any environment.

    Parameters
    ----------
    path : str or Path, optional
        The .env file.  Defaults from ENVLET_ENV_FILE or config, else ``.env``.
    mode : str, optional
        ``"strict"``, ``"lenient"`` or ``"scan"``.  Defaults from config.
    strip_quotes : bool, optional
        Remove surrounding quotes from values.  Defaults from config (False).
    max_offset : int, optional
        Ignore definitions ending past this character offset.

    Returns
    -------
    dict[str, str]
        Mapping of variable name to value; the last definition of a name wins.
        Empty when the file does not exist.
    """
    cfg = load_config()
    definitions = _read_definitions(path, cfg, mode, strip_quotes, max_offset)
    if definitions is None:
        return {}
    return definitions_to_dict(definitions)


def load_dotenv(
    path: str | Path | None = None,
    *,
    store: EnvironmentStore | None = None,
    override: bool | None = None,
    mode: str | None = None,
    strip_quotes: bool | None = None,
    max_offset: int | None = None,
) -> bool:
    """Apply a .env file to an environment store (python-dotenv compatible API).

    The store is rebuilt as its snapshot overlaid with the file's
    definitions, so calling ``load_dotenv`` again with a different file does
    not keep variables that only the previous file defined.

    Parameters
    ----------
    path : str or Path, optional
        The .env file.  Defaults from ENVLET_ENV_FILE or config, else ``.env``.
    store : EnvironmentStore, optional
        Target table.  Defaults to :func:`default_store` (``os.environ``).
    override : bool, optional
        If True, definitions win over variables already present in the
        snapshot.  If False, snapshot values are kept.  Defaults from config
        (True).
    mode, strip_quotes, max_offset
        Parser options, see :func:`dotenv_values`.

    Returns
    -------
    bool
        True if at least one definition was applied, False otherwise.

    Examples
    --------
    >>> from envlet import load_dotenv
    >>> load_dotenv()  # .env in cwd, applied to os.environ
    True
    >>> load_dotenv(".env.local", override=False)
    False
    """
    cfg = load_config()
    definitions = _read_definitions(path, cfg, mode, strip_quotes, max_offset)
    if definitions is None:
        return False
    target = store if store is not None else default_store()
    resolved_override = cfg.override if override is None else override
    applied = [
        d for d in definitions
        if is_valid_name(d.name) and (resolved_override or d.name not in target.snapshot)
    ]
    target.load(definitions, override=resolved_override)
    return len(applied) > 0


def restore_environment(store: EnvironmentStore | None = None) -> None:
    """Reset *store* (default: the process store) to its captured snapshot."""
    target = store if store is not None else default_store()
    target.restore()
