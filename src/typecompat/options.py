from dataclasses import dataclass

from typecompat.adapter import get_adapter, get_available_backends
from typecompat.adapter import is_supported_backend

from libb import ConfigOptions

__all__ = ['CompatOptions', 'REQUIRED_OPTIONS']

REQUIRED_OPTIONS: dict[str, list[str]] = {
    'sqlite': ['database'],
    'postgresql': ['hostname', 'username', 'password', 'database', 'port'],
}


@dataclass
class CompatOptions(ConfigOptions):
    """Options

    supported driver names: `postgresql`, `sqlite`

    Verification options:
    - adapter: Registered backend adapter to check against (default: drivername)
    - table_prefix: Prefix of the scratch table (default: MGR_<ADAPTER>_)
    - staging_dir: Directory receiving imported files (default: a temp dir)
    """
    drivername: str = 'postgresql'
    hostname: str = None
    username: str = None
    password: str = None
    database: str = None
    port: int = 0
    timeout: int = 0
    adapter: str = None
    table_prefix: str = None
    staging_dir: str = None

    def __post_init__(self):
        if self.drivername not in REQUIRED_OPTIONS:
            raise ValueError(f'drivername must be one of: {list(REQUIRED_OPTIONS)}')
        self.adapter = self.adapter or self.drivername
        if not is_supported_backend(self.adapter):
            available = get_available_backends()
            raise ValueError(f'adapter must be one of: {available}')
        for field in REQUIRED_OPTIONS[self.drivername]:
            if not getattr(self, field):
                raise ValueError(f'field {field} cannot be None or 0')
        self.table_prefix = self.table_prefix or get_adapter(self.adapter).table_prefix
