"""
Data models for the Arseeding bundler API.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BundlerModel(BaseModel):
    """Base for bundler wire models: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class APIErrorRes(BundlerModel):
    """Standard error envelope returned on any non-success status"""
    error: str


class BundlerRes(BundlerModel):
    bundler: str


class Tag(BundlerModel):
    """Data item tag"""
    name: str
    value: str


class ItemSubmissionRes(BundlerModel):
    """Order descriptor returned when the bundler accepts a data item"""
    item_id: str
    bundler: str
    currency: str
    decimals: int
    fee: str
    payment_expired_time: int
    expected_block: int


class SubmitNativeRes(BundlerModel):
    item_id: str


class FeeRes(BundlerModel):
    currency: str
    decimals: int
    final_fee: str


class OrderRes(BundlerModel):
    """A bundler order, paid or pending payment"""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    item_id: str
    signer: str
    sign_type: int
    size: int
    currency: str
    decimals: int
    fee: str
    payment_expired_time: int
    expected_block: int
    payment_status: str
    payment_id: str
    on_chain_status: str


class ItemMetaRes(BundlerModel):
    """Metadata of a stored data item"""
    signature_type: int
    signature: str
    owner: str
    target: str
    anchor: str
    tags: List[Tag]
    data: str
    id: str
