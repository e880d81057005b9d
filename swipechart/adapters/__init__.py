from .normalize import normalize_keys, normalize_status, normalize_values

__all__ = ["normalize_keys", "normalize_status", "normalize_values"]
