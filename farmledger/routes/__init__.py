# Blueprints, registered by create_app in this order.
BLUEPRINTS = (
    ("farmledger.routes.auth", None),
    ("farmledger.routes.storage", None),
    ("farmledger.routes.dashboard", "/dashboard"),
    ("farmledger.routes.lands", "/dashboard"),
    ("farmledger.routes.farmers", "/dashboard"),
    ("farmledger.routes.agreements", "/dashboard"),
    ("farmledger.routes.crops", "/dashboard"),
    ("farmledger.routes.parchi", "/dashboard"),
    ("farmledger.routes.payments", "/dashboard"),
)
