from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AttachAllOptions(BaseModel):
	"""Tab query forwarded to the host; mirrors chrome.tabs.query filters."""

	model_config = ConfigDict(extra='allow')
	url: Optional[List[str]] = Field(None, description='URL patterns; a single string is accepted and wrapped.')
	status: Optional[Literal['loading', 'complete']] = None
	active: Optional[bool] = None
	currentWindow: Optional[bool] = None
	lastFocusedWindow: Optional[bool] = None
	windowId: Optional[int] = None
	index: Optional[int] = None
	title: Optional[str] = None
	pinned: Optional[bool] = None
	audible: Optional[bool] = None
	muted: Optional[bool] = None
	groupId: Optional[int] = None

	@field_validator('url', mode='before')
	@classmethod
	def _normalize_url(cls, value: Union[str, List[str], None]) -> Optional[List[str]]:
		# an empty URL means no URL filter
		if value == '':
			return None
		if isinstance(value, str):
			return [value]
		return value

	def to_params(self) -> dict:
		return self.model_dump(exclude_none=True)


class NewPageOptions(BaseModel):
	model_config = ConfigDict(extra='allow')
	url: Optional[str] = None


# --- Outbound events ---


class AttachedEvent(BaseModel):
	model_config = ConfigDict(arbitrary_types_allowed=True)
	tabId: int
	page: Any


class DetachedEvent(BaseModel):
	tabId: int
