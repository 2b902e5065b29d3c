from pydantic import BaseModel


class SessionView(BaseModel):
    """One active device as shown to its owner"""

    ip: str
    title: str
    last_active_date: str
    device_id: str
