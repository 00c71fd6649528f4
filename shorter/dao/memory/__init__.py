from shorter.dao.memory.redirect_memory_dao import RedirectMemoryDAO


__all__ = [
    'RedirectMemoryDAO',
]
