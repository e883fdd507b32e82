from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from . import config
from .production import Recomputation, recompute, with_comparison

logger = logging.getLogger(__name__)

Subscriber = Callable[["ParameterStore", Optional[str]], None]


def normalize_param_value(param: str, value: Any, fallback: Optional[float] = None) -> float:
    """Clamp ``value`` to the slider bounds of ``param`` and snap it to the slider step."""
    cfg = config.PARAM_BOUNDS[param]
    try:
        num = float(value)
    except (TypeError, ValueError):
        num = float(config.DEFAULT_PARAMS[param] if fallback is None else fallback)
    if num != num:
        num = float(config.DEFAULT_PARAMS[param] if fallback is None else fallback)
    num = max(cfg["min"], min(cfg["max"], num))
    step = cfg["step"]
    quantized = cfg["min"] + round((num - cfg["min"]) / step) * step
    quantized = min(cfg["max"], quantized)
    return float(f"{quantized:.12g}")


def normalize_params(raw: Optional[Mapping[str, Any]]) -> Dict[str, float]:
    params = {}
    for key, default_val in config.DEFAULT_PARAMS.items():
        params[key] = normalize_param_value(key, (raw or {}).get(key, default_val))
    return params


def normalized_equal(param: str, old_value: Any, new_value: Any) -> bool:
    old_norm = normalize_param_value(param, old_value)
    new_norm = normalize_param_value(param, new_value)
    return abs(old_norm - new_norm) < 1e-9


class ParameterStore:
    """Current A, N, α and K plus the values derived from them.

    Every mutation recomputes the derived values before subscribers are told.
    Changing K alone keeps both curve series and refreshes only the comparison.
    """

    def __init__(self, params: Optional[Mapping[str, Any]] = None):
        self._params = normalize_params(params)
        self._subscribers: List[Subscriber] = []
        self._derived = recompute(self._params)

    @property
    def params(self) -> Dict[str, float]:
        return dict(self._params)

    @property
    def derived(self) -> Recomputation:
        return self._derived

    def get(self, name: str) -> float:
        return self._params[name]

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set(self, name: str, value: Any) -> bool:
        """Apply one slider change. Returns False when the value is unchanged."""
        if not self._apply_silently(name, value):
            return False
        self._refresh([name])
        self._notify(name)
        return True

    def update(self, values: Mapping[str, Any]) -> List[str]:
        changed = [name for name, value in values.items() if self._apply_silently(name, value)]
        if not changed:
            return []
        self._refresh(changed)
        self._notify(changed[-1] if len(changed) == 1 else None)
        return changed

    def reset(self) -> None:
        self._params = dict(config.DEFAULT_PARAMS)
        self._derived = recompute(self._params)
        logger.debug("Parameters reset to defaults")
        self._notify(None)

    def _apply_silently(self, name: str, value: Any) -> bool:
        if name not in config.PARAM_BOUNDS:
            raise KeyError(name)
        old_value = self._params[name]
        new_value = normalize_param_value(name, value, fallback=old_value)
        if normalized_equal(name, old_value, new_value):
            return False
        self._params[name] = new_value
        logger.debug("%s: %s -> %s", name, old_value, new_value)
        return True

    def _refresh(self, changed: List[str]) -> None:
        if any(name in config.SERIES_PARAM_NAMES for name in changed):
            self._derived = recompute(self._params)
        else:
            self._derived = with_comparison(self._derived, self._params)

    def _notify(self, changed: Optional[str]) -> None:
        for callback in list(self._subscribers):
            callback(self, changed)
