import asyncio
from typing import Optional

import filetype


async def guess_mime_type(data: bytes) -> Optional[str]:
    """Detects the MIME type from the file content (magic numbers), not from client headers."""
    loop = asyncio.get_running_loop()
    kind = await loop.run_in_executor(None, filetype.guess, data)
    return kind.mime if kind is not None else None
