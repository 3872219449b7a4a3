import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from speechviz.config import Config
from speechviz.routers import audio, health, query, schema
from speechviz.exceptions import (
    AppException,
    app_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)
from speechviz.services.config_store import DatabaseConfigStore

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


app = FastAPI(
    title="SpeechViz API",
    version="1.0.0",
    description="Turn spoken questions into SQL, query results and a suggested visualization",
)

# Default DB config for the schema diagram endpoint
app.state.config_store = DatabaseConfigStore()

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(audio.router)
app.include_router(query.router)
app.include_router(schema.router)
