"""HTTP API: FastAPI app, request/response models and the session store."""
