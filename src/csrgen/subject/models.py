from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import DEFAULT_HASH, DEFAULT_KEY_SIZE
from .model import SubjectDescriptor, cn_first_sans


class SubjectRequest(BaseModel):
    country: str
    state: str
    locality: str
    organization: str
    common_name: str
    organizational_unit: Optional[str] = None
    email: Optional[str] = None
    street_address: Optional[str] = None
    postal_code: Optional[str] = None
    sans: List[str] = Field(default_factory=list)
    key_size: str = DEFAULT_KEY_SIZE
    hash_algorithm: str = DEFAULT_HASH
    # keep the common name as the first SAN, as the request form does
    sync_cn_san: bool = True

    @field_validator("key_size", mode="before")
    @classmethod
    def _key_size_text(cls, v):
        # forms send text, JSON clients often send a number
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    def to_subject(self) -> SubjectDescriptor:
        cn = self.common_name
        sans = cn_first_sans(cn, self.sans) if self.sync_cn_san else tuple(s for s in self.sans if s)
        return SubjectDescriptor(
            country=self.country,
            state=self.state,
            locality=self.locality,
            organization=self.organization,
            common_name=cn,
            organizational_unit=self.organizational_unit,
            email=self.email,
            street_address=self.street_address,
            postal_code=self.postal_code,
            subject_alternative_names=sans,
            key_size=self.key_size,
            hash_algorithm=self.hash_algorithm,
        )


class BundleRequest(BaseModel):
    config: str
    name: str
    key_pem: str
    csr_pem: str
