from shorter.dao.redis.redis_key_schema import RedisKeySchema
from shorter.dao.redis.redirect_redis_dao import RedirectRedisDAO
from shorter.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'RedirectRedisDAO',
    'RedisClientMixin',
]
