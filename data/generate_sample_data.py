#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Generate sample weekly store sales data in the Walmart_Sales.csv layout.
The panel carries a known quadratic temperature effect on log sales plus
store, month and year effects, so the regressions have a ground truth.
"""

import os
import numpy as np
import pandas as pd

# Holiday weeks (week-ending Fridays): Super Bowl, Labor Day, Thanksgiving, Christmas
HOLIDAY_WEEKS = pd.to_datetime([
    '2010-02-12', '2010-09-10', '2010-11-26', '2010-12-31',
    '2011-02-11', '2011-09-09', '2011-11-25', '2011-12-30',
    '2012-02-10', '2012-09-07', '2012-11-23', '2012-12-28',
])

# Log-sales shifts by calendar month (holiday shopping in Nov/Dec, January slump)
MONTH_EFFECTS = {1: -0.10, 2: -0.03, 3: 0.00, 4: 0.01, 5: 0.02, 6: 0.03,
                 7: 0.01, 8: 0.02, 9: -0.04, 10: -0.02, 11: 0.08, 12: 0.22}

YEAR_EFFECTS = {2010: 0.00, 2011: 0.01, 2012: 0.02}

CONTROL_EFFECTS = {'Holiday_Flag': 0.05, 'Fuel_Price': -0.02, 'CPI': 0.001, 'Unemployment': -0.01}


def generate_walmart_sales_data(n_stores=45, start_date='2010-02-05', end_date='2012-10-26',
                                temperature_effect=(0.004, -0.00004), noise_scale=0.05,
                                seed=42):
    """
    Generate a weekly store panel.

    Parameters:
    -----------
    n_stores : int, optional
        Number of stores
    start_date, end_date : str, optional
        First and last week-ending Friday
    temperature_effect : tuple, optional
        (linear, squared) coefficients of Fahrenheit temperature on log sales
    noise_scale : float, optional
        Standard deviation of the idiosyncratic log-sales shock
    seed : int, optional
        Random seed

    Returns:
    --------
    pandas.DataFrame
        Columns Store, Date (dd-mm-yyyy strings), Weekly_Sales, Holiday_Flag,
        Temperature, Fuel_Price, CPI, Unemployment
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start=start_date, end=end_date, freq='W-FRI')
    if len(dates) == 0:
        raise ValueError(f"No weeks between {start_date} and {end_date}")

    n_weeks = len(dates)
    day_of_year = dates.dayofyear.values
    weeks_elapsed = np.arange(n_weeks)

    # Fuel prices share a national path
    national_fuel = 2.6 + 1.2 * weeks_elapsed / n_weeks + 0.15 * np.sin(2 * np.pi * day_of_year / 365)
    holiday_flag = dates.isin(HOLIDAY_WEEKS).astype(int)

    frames = []
    for store in range(1, n_stores + 1):
        store_level = np.log(rng.uniform(3e5, 2e6))
        mean_temp = rng.uniform(40, 70)
        temp_amplitude = rng.uniform(10, 25)
        base_cpi = rng.uniform(126, 225)
        base_unemployment = rng.uniform(4, 12)

        # Coldest around mid January
        temperature = (mean_temp
                       - temp_amplitude * np.cos(2 * np.pi * (day_of_year - 15) / 365)
                       + rng.normal(0, 6, n_weeks))
        fuel_price = national_fuel + rng.normal(0, 0.05, n_weeks)
        cpi = base_cpi * (1 + 0.0004 * weeks_elapsed) + rng.normal(0, 0.3, n_weeks)
        unemployment = (base_unemployment - 0.8 * weeks_elapsed / n_weeks
                        + rng.normal(0, 0.1, n_weeks))

        log_sales = (store_level
                     + np.array([MONTH_EFFECTS[m] for m in dates.month])
                     + np.array([YEAR_EFFECTS.get(y, 0.0) for y in dates.year])
                     + temperature_effect[0] * temperature
                     + temperature_effect[1] * temperature ** 2
                     + CONTROL_EFFECTS['Holiday_Flag'] * holiday_flag
                     + CONTROL_EFFECTS['Fuel_Price'] * fuel_price
                     + CONTROL_EFFECTS['CPI'] * cpi
                     + CONTROL_EFFECTS['Unemployment'] * unemployment
                     + rng.normal(0, noise_scale, n_weeks))

        frames.append(pd.DataFrame({
            'Store': store,
            'Date': dates.strftime('%d-%m-%Y'),
            'Weekly_Sales': np.round(np.exp(log_sales), 2),
            'Holiday_Flag': holiday_flag,
            'Temperature': np.round(temperature, 2),
            'Fuel_Price': np.round(fuel_price, 3),
            'CPI': np.round(cpi, 7),
            'Unemployment': np.round(unemployment, 3),
        }))

    return pd.concat(frames, ignore_index=True)


if __name__ == "__main__":
    raw_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "raw_data")
    if not os.path.exists(raw_dir):
        os.makedirs(raw_dir)

    sales_df = generate_walmart_sales_data()
    output_path = os.path.join(raw_dir, "Walmart_Sales.csv")
    sales_df.to_csv(output_path, index=False)

    print(f"Saved {len(sales_df)} rows for {sales_df['Store'].nunique()} stores to {output_path}")
