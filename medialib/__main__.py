import logging

import uvicorn

from medialib.config import HOST, LOG_LEVEL, MEDIA_ROOT, PORT


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logger = logging.getLogger("medialib")
    logger.info("media root: %s", MEDIA_ROOT)
    logger.info("listening on http://%s:%s", HOST, PORT)
    if not MEDIA_ROOT.is_dir():
        logger.warning("media root %s does not exist or is not a directory", MEDIA_ROOT)
    uvicorn.run("medialib.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
