"""User Domain Model

User 由身份服务一侧拥有，活动核心只读取 {id, name, email} 投影。
"""

from datetime import datetime

from pydantic import BaseModel, Field


class User(BaseModel):
    """User 数据模型"""

    user_id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(description="显示名称")
    email: str = Field(description="邮箱，唯一")
    created_at: datetime = Field(description="创建时间")


class UserSummary(BaseModel):
    """引用解析后的用户投影"""

    id: str
    name: str
    email: str
