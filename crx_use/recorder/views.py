from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

# Known recorder modes; the host may report others
Mode = Literal[
	'none',
	'inspecting',
	'recording',
	'recording-inspecting',
	'standby',
	'assertingText',
	'assertingVisibility',
	'assertingValue',
	'assertingSnapshot',
]


class RecorderWindow(BaseModel):
	model_config = ConfigDict(extra='allow')
	type: Literal['popup', 'sidepanel']
	url: Optional[str] = None


class ShowRecorderOptions(BaseModel):
	model_config = ConfigDict(extra='allow')
	mode: Optional[str] = None
	language: Optional[str] = None
	window: Optional[RecorderWindow] = None


# --- Inbound events ---


class ModeChangedEvent(BaseModel):
	model_config = ConfigDict(extra='allow')
	mode: str
