"""CRUD operations for chapter entities using FastCRUD."""

from fastcrud import FastCRUD

from .models import Chapter

chapter_crud: FastCRUD = FastCRUD(Chapter)
