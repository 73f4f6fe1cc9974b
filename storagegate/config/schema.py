"""Configuration schemas using Pydantic"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from storagegate.gate.flows import PERMISSION_REQUEST_CODE
from storagegate.gate.prompt import ModalPrompt

_DEFAULT_PROMPT = ModalPrompt()


class PromptConfig(BaseModel):
    """Text of the access prompt"""
    title: str = _DEFAULT_PROMPT.title
    message: str = _DEFAULT_PROMPT.message
    continue_label: str = _DEFAULT_PROMPT.continue_label
    exit_label: str = _DEFAULT_PROMPT.exit_label

    def to_prompt(self) -> ModalPrompt:
        return ModalPrompt(
            title=self.title,
            message=self.message,
            continue_label=self.continue_label,
            exit_label=self.exit_label,
        )


class PlatformConfig(BaseModel):
    """Platform identity and capability tier"""
    package_name: str = "com.storagegate.app"
    # None = detect (environment override, then default tier)
    tier: Optional[int] = Field(default=None, ge=1)
    request_code: int = PERMISSION_REQUEST_CODE


class StorageConfig(BaseModel):
    """Storage the gate protects"""
    root: Path = Field(default_factory=lambda: Path.home() / "StorageGate")


class AuditConfig(BaseModel):
    """Audit trail settings"""
    enabled: bool = True
    file: Optional[Path] = None  # Default: ~/.local/share/storagegate/audit.jsonl


class GateConfig(BaseModel):
    """Main configuration"""
    prompt: PromptConfig = Field(default_factory=PromptConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
    theme: str = "storagegate-dark"
