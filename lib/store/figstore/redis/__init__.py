from figstore.redis.client import RedisClient

__all__ = ["RedisClient"]
