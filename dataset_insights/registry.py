from typing import Dict, List, Type

from .base import DetectorBase

_REGISTRY: Dict[str, Type[DetectorBase]] = {}


def register(name: str):
    def wrap(detector_cls: Type[DetectorBase]) -> Type[DetectorBase]:
        _REGISTRY[name] = detector_cls
        return detector_cls
    return wrap


def get_detector(name: str) -> DetectorBase:
    cls = _REGISTRY.get((name or '').lower())
    if cls is None:
        raise KeyError(f'No insight detector registered as {name!r}')
    return cls()


def get_detectors() -> List[DetectorBase]:
    """Instances of every registered detector, in registration order."""
    return [cls() for cls in _REGISTRY.values()]


def registered_names() -> List[str]:
    return list(_REGISTRY)
