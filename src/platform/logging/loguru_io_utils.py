from inspect import FullArgSpec, getfile, getfullargspec, getsourcelines
from os.path import basename
from re import sub
from time import time
from typing import Any, Callable

from src.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MASK = '********'
TRUNCATE_LIMIT = 500

_SENSITIVE_PATTERN = r"({0})(=|': ')[^,)'}}]*('?)".format('|'.join(sorted(SENSITIVE_KEYWORDS)))


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def normalize_args_kwargs(
    func: Callable[..., Any], *args: Any, **kwargs: Any
) -> tuple[tuple[Any, ...], dict[Any, Any]]:
    if hasattr(func, '__wrapped__'):
        func = func.__wrapped__  # type: ignore
    full_arg_spec: FullArgSpec = getfullargspec(func)
    spec_args: list[str] = full_arg_spec.args

    if not full_arg_spec.varkw:
        kw_list: list[str] = spec_args + full_arg_spec.kwonlyargs
        kwargs = {k: v for k, v in kwargs.items() if k in kw_list}

    if not full_arg_spec.varargs and len(args) > len(spec_args):
        args = args[: len(spec_args)]

    return args, kwargs


def _mask_text(data: Any) -> Any:
    # repr of attrs entities and pydantic models can carry secrets inline
    try:
        data_str = str(data)
    except Exception:
        return data
    masked = sub(_SENSITIVE_PATTERN, rf"\1\2{MASK}\3", data_str)
    return data if data_str == masked else masked


def _truncate(data: Any) -> Any:
    if isinstance(data, str) and len(data) > TRUNCATE_LIMIT:
        return f'{data[:TRUNCATE_LIMIT]}...(truncated)'
    return data


def mask_payload(data: Any, *, truncate: bool = False) -> Any:
    """Mask sensitive values by key or inline pattern; optionally cap long text."""
    if isinstance(data, dict):
        processed: Any = {
            key: MASK
            if key in SENSITIVE_KEYWORDS
            else mask_payload(value, truncate=truncate)
            for key, value in data.items()
        }
    elif isinstance(data, list | tuple):
        processed = type(data)(mask_payload(item, truncate=truncate) for item in data)
    else:
        processed = _mask_text(data)

    return _truncate(processed) if truncate else processed
