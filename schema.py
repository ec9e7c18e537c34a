from pydantic import BaseModel, Field

class Info(BaseModel):
    # Only presence is checked; no email format validation.
    username: str
    email: str

class AccountInfo(BaseModel):
    lamports: int
    owner: str
    # Account data as returned by the node, base64 encoded.
    data: str
    executable: bool
    # [RPC] The node calls it "rentEpoch"; we expose rent_epoch.
    rent_epoch: int = Field(validation_alias="rentEpoch")
    space: int | None = None

    model_config = {"populate_by_name": True}
