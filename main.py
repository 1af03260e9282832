"""Main entry point for the Nural eval gateway."""

from eval_gateway.app import EvalGatewayApp
from eval_gateway.shared.config import Config


# Create application instance
app_instance = EvalGatewayApp()
app = app_instance.app


if __name__ == "__main__":
    import uvicorn

    server_config = Config()
    uvicorn.run(app, host=server_config.server_host, port=server_config.server_port)
