"""Manage files - list, rename, share and clean up.

This example demonstrates:
- Resolving the API secret from UPLOADTHING_SECRET
- Paging through files with list_files
- Renaming files and requesting a presigned URL
- Handling OperationResult errors without exceptions

Run with:
    UPLOADTHING_SECRET=sk_live_... python examples/manage_files.py
"""

import asyncio
import logging
from datetime import timedelta

from utapi import FileStatus, UtApi


async def main() -> None:
    async with UtApi() as api:
        usage = (await api.get_usage_info()).unwrap()
        print(f"Using {usage.app_total_readable} of {usage.limit_readable}")

        # Step 1: List the most recent files
        result = await api.list_files(limit=10)
        if not result.ok:
            print(f"Listing failed: {result.error}")
            return
        files = result.data.files

        # Step 2: Remove uploads that never completed
        failed = [f.key for f in files if f.status is FileStatus.FAILED]
        if failed:
            deleted = await api.delete_files(failed)
            print(f"Deleted {len(failed)} failed uploads: {deleted.ok}")

        uploaded = [f for f in files if f.status is FileStatus.UPLOADED]
        if not uploaded:
            return

        # Step 3: Give the newest file a stable name and share it for a day
        newest = uploaded[0]
        renamed = await api.rename_files({newest.key: "latest-upload"})
        if not renamed.ok:
            print(f"Rename failed: {renamed.error}")

        presigned = await api.get_presigned_url(newest.key, expires_in=timedelta(days=1))
        if presigned.ok:
            print(f"Share link: {presigned.data.url}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
