"""模块说明：schema。"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class Config(BaseSettings):
    """
    进程级配置，启动时读取一次，运行期间只读。

    优先级：环境变量（VVBOT_<FIELD>，网关地址另支持 NAPCAT_API_HOST）> 配置文件 > 默认值。
    """
    model_config = SettingsConfigDict(
        env_prefix="VVBOT_",
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    napcat_access_token: str = ""  # NapCat HTTP 服务的 access token
    qq: str  # 机器人自己的 QQ 号
    listen_host: str = "0.0.0.0"
    listen_port: int = 8080  # 接收 webhook 的本地端口
    napcat_api_host: str = Field(
        default="127.0.0.1",
        validation_alias=AliasChoices("napcat_api_host", "NAPCAT_API_HOST", "VVBOT_NAPCAT_API_HOST"),
    )
    napcat_api_port: int = 3000
    search_api_base: str = "https://api.zvv.quest"
    http_timeout: float = 10.0  # 出站请求超时（秒）
    log_level: str = "INFO"

    @field_validator("qq", mode="before")
    @classmethod
    def _check_qq(cls, value: object) -> str:
        value = str(value).strip()
        if not value.isdigit():
            raise ValueError(f"qq must be a numeric QQ id, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # 环境变量覆盖配置文件（配置文件内容通过 init 参数传入）
        return env_settings, init_settings, dotenv_settings, file_secret_settings
