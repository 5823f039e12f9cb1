# prayerclock/extensions.py

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_smorest import Api

# Limiter का एक्सटेंशन (Rate limiting के लिए); limits come from RATELIMIT_DEFAULT in config
limiter = Limiter(key_func=get_remote_address)

cors = CORS()

api = Api() # Flask-Smorest API
