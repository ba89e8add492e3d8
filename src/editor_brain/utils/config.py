"""Configuration management for the Editor AI Brain"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from ..video_intelligence.analysis_models import AnalysisConfig
from ..creative_assembly.creative_models import EditorMode, Platform, VoiceProfile
from ..render_translation.render_models import DEFAULT_TEMPLATE_ID, BrandColors


class AssemblyConfig(BaseModel):
    mode: EditorMode = EditorMode.SMART_ASSIST
    platform: Platform = Platform.INSTAGRAM
    target_duration: float = 15.0
    include_hashtags: bool = True
    variant_count: int = Field(default=3, ge=1)


class RenderConfig(BaseModel):
    template_id: str = DEFAULT_TEMPLATE_ID
    platforms: List[Platform] = [Platform.INSTAGRAM]


class VoiceLayers(BaseModel):
    """Voice profile layers, lowest precedence first"""
    default: VoiceProfile = VoiceProfile()
    brand: VoiceProfile = VoiceProfile()
    org: VoiceProfile = VoiceProfile()
    customer: VoiceProfile = VoiceProfile()

    def ordered(self) -> List[VoiceProfile]:
        return [self.default, self.brand, self.org, self.customer]


class BrandConfig(BaseModel):
    voice: VoiceLayers = VoiceLayers()
    colors: BrandColors = BrandColors()
    music_url: Optional[str] = None
    logo_url: Optional[str] = None


class LLMConfig(BaseModel):
    model_name: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 2000


class PathsConfig(BaseModel):
    """Storage paths configuration"""
    output: str = "./output"
    logs: str = "./logs"


class Config(BaseModel):
    analysis: AnalysisConfig = AnalysisConfig()
    assembly: AssemblyConfig = AssemblyConfig()
    render: RenderConfig = RenderConfig()
    brand: BrandConfig = BrandConfig()
    llm: LLMConfig = LLMConfig()
    paths: PathsConfig = PathsConfig()
    logging: Dict[str, Any] = {}

    @classmethod
    def load(cls, config_path: str) -> "Config":
        """Load configuration from YAML file"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    def save(self, config_path: str):
        """Save configuration to YAML file"""
        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.model_dump(mode='json'), f, default_flow_style=False)
