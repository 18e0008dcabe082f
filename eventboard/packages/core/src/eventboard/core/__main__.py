"""CLI 入口模块 -- python -m eventboard.core <command>

支持的命令：
  create-user <name> <email>  创建用户并输出 user_id
  list-users                  列出全部用户
"""

import asyncio
import sys
from datetime import UTC, datetime

import aiosqlite
from ulid import ULID

from .config import get_db_path, get_uploads_dir
from .models import User


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        _print_usage()
        sys.exit(1)

    command = sys.argv[1]

    if command == "create-user":
        if len(sys.argv) != 4:
            print("用法: python -m eventboard.core create-user <name> <email>")
            sys.exit(1)
        try:
            user = asyncio.run(create_user(sys.argv[2], sys.argv[3]))
        except aiosqlite.IntegrityError:
            print(f"邮箱已存在: {sys.argv[3]}")
            sys.exit(1)
        print(user.user_id)
    elif command == "list-users":
        for user in asyncio.run(list_users()):
            print(f"{user.user_id}\t{user.name}\t{user.email}")
    else:
        print(f"未知命令: {command}")
        print("可用命令: create-user, list-users")
        sys.exit(1)


def _print_usage() -> None:
    print("用法: python -m eventboard.core <command>")
    print("命令:")
    print("  create-user <name> <email>  创建用户并输出 user_id")
    print("  list-users                  列出全部用户")


async def create_user(name: str, email: str) -> User:
    """创建用户（邮箱唯一）"""
    from .store import create_store_group, insert_user

    store_group = await create_store_group(get_db_path(), get_uploads_dir())
    user = User(
        user_id=str(ULID()),
        name=name,
        email=email,
        created_at=datetime.now(UTC),
    )
    try:
        await insert_user(store_group.conn, store_group.user_store, user)
    finally:
        await store_group.conn.close()
    return user


async def list_users() -> list[User]:
    """查询全部用户"""
    from .store import create_store_group

    store_group = await create_store_group(get_db_path(), get_uploads_dir())
    try:
        return await store_group.user_store.list_users()
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
