
from dotenv import load_dotenv

# Load environment variables from .env before any module reads os.environ
# (Elasticsearch connection details, index names, pool sizes).
load_dotenv()
