"""Schemas for postal code (CEP) address lookup."""

from pydantic import BaseModel, Field


class PostalAddress(BaseModel):
    """Address resolved from a CEP; number and complement are filled in by the user."""

    cep: str
    street: str = Field(default="", description="logradouro")
    neighborhood: str = Field(default="", description="bairro")
    city: str = Field(default="", description="localidade")
    state: str = Field(default="", description="uf")
    complement: str = Field(default="", description="complemento")
