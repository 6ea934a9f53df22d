# Minimal Airlock ABI: the `create` entrypoint and the owner getter.

CREATE_PARAMS_COMPONENTS = [
    {"name": "initialSupply", "type": "uint256"},
    {"name": "numTokensToSell", "type": "uint256"},
    {"name": "numeraire", "type": "address"},
    {"name": "tokenFactory", "type": "address"},
    {"name": "tokenFactoryData", "type": "bytes"},
    {"name": "governanceFactory", "type": "address"},
    {"name": "governanceFactoryData", "type": "bytes"},
    {"name": "poolInitializer", "type": "address"},
    {"name": "poolInitializerData", "type": "bytes"},
    {"name": "liquidityMigrator", "type": "address"},
    {"name": "liquidityMigratorData", "type": "bytes"},
    {"name": "integrator", "type": "address"},
    {"name": "salt", "type": "bytes32"},
]

CREATE_PARAMS_TUPLE_TYPE = (
    "(" + ",".join(c["type"] for c in CREATE_PARAMS_COMPONENTS) + ")"
)

AIRLOCK_ABI = [
    {
        "name": "create",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "createData",
                "type": "tuple",
                "components": CREATE_PARAMS_COMPONENTS,
            }
        ],
        "outputs": [
            {"name": "asset", "type": "address"},
            {"name": "pool", "type": "address"},
            {"name": "governance", "type": "address"},
            {"name": "timelock", "type": "address"},
            {"name": "migrationPool", "type": "address"},
        ],
    },
    {
        "name": "owner",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "address"}],
    },
]
