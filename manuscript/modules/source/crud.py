"""CRUD operations for source entities using FastCRUD."""

from fastcrud import FastCRUD

from .models import Source

source_crud: FastCRUD = FastCRUD(Source)
