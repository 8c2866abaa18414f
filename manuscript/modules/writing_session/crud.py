"""CRUD operations for writing sessions using FastCRUD."""

from fastcrud import FastCRUD

from .models import WritingSession

writing_session_crud: FastCRUD = FastCRUD(WritingSession)
