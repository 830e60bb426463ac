from dotenv import load_dotenv

from gymrank.utils.logging_config import setup_logger

load_dotenv('./.env')

network_logger = setup_logger("network", "network.log")
