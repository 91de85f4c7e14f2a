import os
from dotenv import load_dotenv

load_dotenv()

REGISTRY_BACKEND = os.getenv("REGISTRY_BACKEND", "memory").lower()
REGISTRY_OWNER_ID = os.getenv("REGISTRY_OWNER_ID")
REGISTRY_NAMESPACE = os.getenv("REGISTRY_NAMESPACE", "university_registry")
REGISTRY_LOG_LEVEL = os.getenv("REGISTRY_LOG_LEVEL", "INFO").upper()

REDIS_URL = os.getenv("REDIS_URL")

def validate_settings(raise_on_missing: bool = False):
	missing = []
	if not REGISTRY_OWNER_ID:
		missing.append('REGISTRY_OWNER_ID')
	if REGISTRY_BACKEND not in ('memory', 'redis'):
		missing.append('REGISTRY_BACKEND')
	if missing and raise_on_missing:
		raise EnvironmentError(f"Missing or invalid env vars: {', '.join(missing)}")
	return missing
