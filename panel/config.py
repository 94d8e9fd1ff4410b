import os
import dotenv
dotenv.load_dotenv()

# The API base URL is the only thing a deployment normally changes
API_BASE_URL = os.environ.get('ADMIN_API_BASE_URL', 'http://localhost:3002/api/v1')
API_TIMEOUT = float(os.environ.get('ADMIN_API_TIMEOUT', '30'))

# Role id that sees every page with every action
PRIVILEGED_ROLE_ID = int(os.environ.get('PRIVILEGED_ROLE_ID', '2'))
