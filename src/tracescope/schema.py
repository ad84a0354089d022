from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class StackFrameDTO(BaseModel):
    name: str
    file: Optional[str] = None
    line: Optional[int] = None


class StackFramesResponseDTO(BaseModel):
    parser: str
    resolve_names: bool = True
    version: Optional[str] = None
    frames: List[StackFrameDTO] = []


class QualnameResponseDTO(BaseModel):
    path: str
    line: int
    function: str
    qualified_name: str
    parser: str
    version: Optional[str] = None
