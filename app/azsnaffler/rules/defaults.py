"""Default rule tables for sensitive file discovery.

Each table is an immutable tuple of case-insensitive tokens. Directory
names are matched by equality, extensions and path suffixes by suffix,
and filename tokens by substring.
"""

# Administrative shares that are never worth descending into.
EXCLUDED_DIRECTORY_NAMES: tuple[str, ...] = (
    "IPC$",
    "PRINT$",
)

# Directory names whose presence alone is worth reporting.
INTERESTING_DIRECTORY_NAMES: tuple[str, ...] = (
    "C$",
    "ADMIN$",
    "SCCMCONTENTLIB$",
)

# Low-signal, high-volume file types.
EXCLUDED_EXTENSIONS: tuple[str, ...] = (
    # Images
    ".bmp",
    ".eps",
    ".gif",
    ".ico",
    ".jfi",
    ".jfif",
    ".jif",
    ".jpe",
    ".jpeg",
    ".jpg",
    ".png",
    ".psd",
    ".svg",
    ".tif",
    ".tiff",
    ".webp",
    ".xcf",
    # Fonts
    ".ttf",
    ".otf",
    # Lockfiles and stylesheets
    ".lock",
    ".css",
    ".less",
    # Group policy templates and schemas
    ".admx",
    ".adml",
    ".xsd",
)

# Known-benign files that would otherwise trip the name/extension rules.
EXCLUDED_PATH_SUFFIXES: tuple[str, ...] = (
    "jmxremote.password.template",
    "sceregvl.inf",
)

INTERESTING_FILENAME_SUBSTRINGS: tuple[str, ...] = (
    # Generic credential words
    "PASSW",
    "SECRET",
    "CREDENTIAL",
    "THYCOTIC",
    "CYBERARK",
    # Shell and interpreter state
    "ConsoleHost_history.txt",
    ".functions",
    ".exports",
    ".netrc",
    ".extra",
    ".npmrc",
    ".env",
    ".bashrc",
    ".profile",
    ".zshrc",
    ".bash_history",
    ".zsh_history",
    ".sh_history",
    "zhistory",
    ".irb_history",
    ".mysql_history",
    ".psql_history",
    # Web applications
    ".htpasswd",
    "LocalSettings.php",
    "database.yml",
    ".secret_token.rb",
    "knife.rb",
    "carrierwave.rb",
    "omniauth.rb",
    # Jenkins, deployment and provisioning
    "credentials.xml",
    "SensorConfiguration.json",
    ".var",
    "Variables.dat",
    "Policy.xml",
    "unattend.xml",
    "Autounattend.xml",
    # FTP
    "proftpdpasswd",
    "filezilla.xml",
    "recentservers.xml",
    "sftp-config.json",
    # Memory and hibernation dumps
    "lsass.dmp",
    "lsass.exe.dmp",
    "hiberfil.sys",
    "MEMORY.DMP",
    # Network devices
    "running-config.cfg",
    "startup-config.cfg",
    "running-config",
    "startup-config",
    "cisco",
    "router",
    "firewall",
    "switch",
    # Unix account databases
    "shadow",
    "pwd.db",
    "passwd",
    # CyberArk
    "Psmapp.cred",
    "psmgw.cred",
    "backup.key",
    "MasterReplicationUser.pass",
    "RecPrv.key",
    "ReplicationUser.pass",
    "Server.key",
    "VaultEmergency.pass",
    "VaultUser.pass",
    "Vault.ini",
    "PADR.ini",
    "PARAgent.ini",
    "CACPMScanner.exe.config",
    "PVConfiguration.xml",
    # Windows credential stores
    "NTDS.DIT",
    "SYSTEM",
    "SAM",
    "SECURITY",
    # Client tools
    ".tugboat",
    "logins.json",
    "SqlStudio.bin",
    ".pgpass",
    ".dbeaver-data-sources.xml",
    "credentials-config.json",
    "dbvis.xml",
    "robomongo.json",
    ".git-credentials",
    "mobaxterm.ini",
    "mobaxterm backup.zip",
    "confCons.xml",
    # Office documents with telling names
    "passwords.txt",
    "password.txt",
    "pass.txt",
    "accounts.txt",
    "passwords.doc",
    "passwords.docx",
    "pass.doc",
    "pass.docx",
    "accounts.doc",
    "accounts.docx",
    "passwords.xls",
    "passwords.xlsx",
    "pass.xls",
    "pass.xlsx",
    "accounts.xls",
    "accounts.xlsx",
    "secrets.txt",
    "secrets.doc",
    "secrets.docx",
    "secrets.xls",
    "secrets.xlsx",
    # SSH private keys
    "id_rsa",
    "id_dsa",
    "id_ecdsa",
    "id_ed25519",
)

INTERESTING_EXTENSIONS: tuple[str, ...] = (
    # PowerShell, .NET and ASP
    ".psd1",
    ".psm1",
    ".ps1",
    ".aspx",
    ".ashx",
    ".asmx",
    ".asp",
    ".cshtml",
    ".cs",
    ".ascx",
    ".config",
    # Batch
    ".bat",
    ".cmd",
    # Configuration formats
    ".yaml",
    ".yml",
    ".toml",
    ".xml",
    ".json",
    ".ini",
    ".inf",
    ".cnf",
    ".conf",
    ".properties",
    ".env",
    ".dist",
    ".txt",
    ".tfvars",
    # Databases and logs
    ".sql",
    ".log",
    ".sqlite",
    ".sqlite3",
    ".fdb",
    ".mdf",
    ".sdf",
    ".sqldump",
    ".bak",
    # Java, JavaScript and friends
    ".jsp",
    ".do",
    ".java",
    ".cfm",
    ".js",
    ".cjs",
    ".mjs",
    ".ts",
    ".tsx",
    ".ls",
    ".es6",
    ".es",
    # PHP
    ".php",
    ".phtml",
    ".inc",
    ".php3",
    ".php5",
    ".php7",
    # Other scripting languages
    ".pl",
    ".py",
    ".rb",
    ".vbs",
    ".vbe",
    ".wsf",
    ".wsc",
    ".hta",
    # Keys and certificates
    ".pem",
    ".der",
    ".pfx",
    ".pk12",
    ".p12",
    ".pkcs12",
    ".ppk",
    # Images, dumps and captures
    ".wim",
    ".ova",
    ".ovf",
    ".cscfg",
    ".dmp",
    ".pcap",
    ".cap",
    ".pcapng",
    # Credential stores
    ".cred",
    ".pass",
    ".kdbx",
    ".kdb",
    ".psafe3",
    ".kwallet",
    ".keychain",
    ".agilekeychain",
    # Remote access
    ".rdg",
    ".rtsz",
    ".rtsx",
    ".ovpn",
    ".rdp",
)

# Hand-curated locations; matched against the full path or any ancestor.
INTERESTING_PATH_SUFFIXES: tuple[str, ...] = (
    "jenkins.plugins.publish_over_ssh.BapSshPublisherPlugin.xml",
    "control/customsettings.ini",
    ".aws",
    "doctl/config.yaml",
    ".ssh",
    ".azure",
)
