from .api_helper import ApiHelper as ApiHelper
from .data_api_helper import DataApiHelper as DataApiHelper
from .auth_api_helper import AuthApiHelper as AuthApiHelper
