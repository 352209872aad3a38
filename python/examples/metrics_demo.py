import random, time

from logwrap import LogwrapSettings, counter_wrapper, failure_counter, init_from_env, log, shutdown

def main():
    settings = init_from_env(LogwrapSettings(service_name="py-metrics", default_wrapper="structlog:warn:component=exporter"))
    exporter_logger = counter_wrapper(settings.default_wrapper, failure_counter("exporter_failures_total"))

    for i in range(10):
        if random.random() < 0.3:
            log(exporter_logger, None, f"batch {i} dropped: collector unavailable")
        time.sleep(0.2)

    shutdown()

if __name__ == "__main__":
    main()
