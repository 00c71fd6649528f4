from shorter.dao.mongo.redirect_mongo_dao import RedirectMongoDAO
from shorter.dao.mongo.mixins import MongoClientMixin


__all__ = [
    'RedirectMongoDAO',
    'MongoClientMixin',
]
