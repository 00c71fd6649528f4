from shorter.dao.base import RedirectBaseDAO


__all__ = [
    'RedirectBaseDAO',
]
