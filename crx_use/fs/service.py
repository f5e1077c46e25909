"""
CrxFs: async file-system pass-through exposed as ``Crx.fs``

Thin wrapper over aiofiles so hosts can read and write files without blocking
the event loop. It holds no state and has no effect on sessions.
"""

import logging
import os
from typing import List, Optional, Union

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

PathLike = Union[str, 'os.PathLike[str]']


class CrxFs:
	async def read_file(self, path: PathLike, encoding: Optional[str] = None) -> Union[str, bytes]:
		"""Return the file content, decoded when ``encoding`` is given."""
		if encoding:
			async with aiofiles.open(path, 'r', encoding=encoding) as f:
				return await f.read()
		async with aiofiles.open(path, 'rb') as f:
			return await f.read()

	async def write_file(self, path: PathLike, data: Union[str, bytes], encoding: str = 'utf-8') -> None:
		if isinstance(data, bytes):
			async with aiofiles.open(path, 'wb') as f:
				await f.write(data)
		else:
			async with aiofiles.open(path, 'w', encoding=encoding) as f:
				await f.write(data)
		logger.debug(f'Wrote {len(data)} chars/bytes to {path}')

	async def append_file(self, path: PathLike, data: Union[str, bytes], encoding: str = 'utf-8') -> None:
		if isinstance(data, bytes):
			async with aiofiles.open(path, 'ab') as f:
				await f.write(data)
		else:
			async with aiofiles.open(path, 'a', encoding=encoding) as f:
				await f.write(data)

	async def exists(self, path: PathLike) -> bool:
		return await aiofiles.os.path.exists(path)

	async def stat(self, path: PathLike) -> os.stat_result:
		return await aiofiles.os.stat(path)

	async def mkdir(self, path: PathLike, recursive: bool = False) -> None:
		if recursive:
			await aiofiles.os.makedirs(path, exist_ok=True)
		else:
			await aiofiles.os.mkdir(path)

	async def readdir(self, path: PathLike) -> List[str]:
		return sorted(await aiofiles.os.listdir(path))

	async def unlink(self, path: PathLike) -> None:
		await aiofiles.os.remove(path)

	async def rmdir(self, path: PathLike) -> None:
		await aiofiles.os.rmdir(path)

	async def rename(self, old_path: PathLike, new_path: PathLike) -> None:
		await aiofiles.os.rename(old_path, new_path)
