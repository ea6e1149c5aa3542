# Business operations shared by the routers and the reporting core.
